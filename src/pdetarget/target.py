# /*******************************************************************************
# * Copyright (c) 14.03.2013 Aaron Digulla.
# * All rights reserved. This program and the accompanying materials
# * are made available under the terms of the Eclipse Public License v1.0
# * which accompanies this distribution, and is available at
# * http://www.eclipse.org/legal/epl-v10.html
# *
# * Contributors:
# *    Aaron Digulla - initial API and implementation and/or initial documentation
# *******************************************************************************/
'''
Tools to work with Eclipse PDE target definitions

A target definition looks like this:

    <?pde version="3.8"?>
    <target name="demo" sequenceNumber="1">
      <locations>
        <location path="/home/me/.m2/repository/junit/junit/4.11" type="Directory"/>
      </locations>
    </target>

Created on Mar 14, 2013

@author: Aaron Digulla <digulla@hepe.com>
'''

import copy
import logging
from lxml import etree

from pdetarget.common import ConfigurationError, MalformedInputError, SerializationError, ensureParentDirectory
from pdetarget.buildcontext import DefaultBuildContext

log = logging.getLogger('pdetarget.target')

LOCATIONS_XPATH = '/target/locations'
DIRECTORY_TYPE = 'Directory'

APPEND = 'append'
PREPEND = 'prepend'
PLACEMENTS = (APPEND, PREPEND)

def createDirectoryLocation(path):
    '''<location path="..." type="Directory"/>'''
    element = etree.Element('location')
    element.set('path', path)
    element.set('type', DIRECTORY_TYPE)
    return element

def insertLocations(locations, directories, placement=APPEND):
    '''Add one directory location per path to the <locations> element.

    With PREPEND, the new elements are inserted before the existing
    children; they keep the order of directories in both cases.'''
    if placement not in PLACEMENTS:
        raise ConfigurationError('Unknown placement %r; expected one of %s' % (placement, ', '.join(PLACEMENTS)))

    for index, dir in enumerate(directories):
        element = createDirectoryLocation(dir)

        if placement == PREPEND:
            locations.insert(index, element)
        else:
            locations.append(element)

        log.debug('Added location %s' % dir)

class TargetDefinition(object):
    '''Helper class to work with target definition files'''
    def __init__(self, targetFile=None):
        self.targetFile = targetFile
        self.xml = None

        if self.targetFile is not None:
            self.load()

    def load(self):
        # Drop the formatting so pretty printing produces the same layout every time
        parser = etree.XMLParser(remove_blank_text=True, resolve_entities=False)
        try:
            self.xml = etree.parse(self.targetFile, parser=parser)
        except etree.XMLSyntaxError as e:
            raise MalformedInputError('Error parsing target definition %s: %s' % (self.name(), e)) from e
        except OSError as e:
            raise ConfigurationError("Can't read target definition %s: %s" % (self.name(), e)) from e

    def name(self):
        return getattr(self.targetFile, 'name', self.targetFile)

    def locations(self):
        '''The <locations> element'''
        nodes = self.xml.xpath(LOCATIONS_XPATH)
        if not nodes:
            raise MalformedInputError('<locations> node cannot be found in base target definition %s' % self.name())

        return nodes[0]

    def directoryLocations(self):
        '''Paths of all directory locations in document order'''
        return [loc.get('path') for loc in self.locations().iterchildren('location')
                if loc.get('type') == DIRECTORY_TYPE]

    def withLocations(self, directories, placement=APPEND):
        '''Return a copy of this target definition with additional directory locations.

        This instance isn't modified.'''
        result = TargetDefinition()
        result.targetFile = self.targetFile
        result.xml = copy.deepcopy(self.xml)

        insertLocations(result.locations(), directories, placement)

        return result

    def toBytes(self):
        return etree.tostring(self.xml, encoding='UTF-8', xml_declaration=True, pretty_print=True)

    def __repr__(self):
        return self.toBytes().decode('UTF-8')

    def save(self, fileName, buildContext=None):
        '''Save this target definition to a file, creating missing parent directories'''
        if buildContext is None:
            buildContext = DefaultBuildContext()

        ensureParentDirectory(fileName)

        data = self.toBytes()
        try:
            with buildContext.newFileOutputStream(fileName) as fh:
                fh.write(data)
        except OSError as e:
            raise SerializationError("Can't write target definition %s: %s" % (fileName, e)) from e

        log.debug('Wrote %s' % fileName)
