# /*******************************************************************************
# * Copyright (c) 16.03.2013 Aaron Digulla.
# * All rights reserved. This program and the accompanying materials
# * are made available under the terms of the Eclipse Public License v1.0
# * which accompanies this distribution, and is available at
# * http://www.eclipse.org/legal/epl-v10.html
# *
# * Contributors:
# *    Aaron Digulla - initial API and implementation and/or initial documentation
# *******************************************************************************/
'''
Test cases for pde-target

Created on Mar 16, 2013

@author: Aaron Digulla <digulla@hepe.com>
'''

import os
import sys
import logging
import pytest

from pdetarget.common import ConfigurationError, MalformedInputError
from pdetarget.config import Configuration
from pdetarget.artifacts import ResolvedArtifact
from pdetarget.buildcontext import IncrementalBuildContext
from pdetarget.target import TargetDefinition
from pdetarget.tool import AddPomDependencies, main, run
from helpers import makeJar, makeManifest, writeFile

BASE_TARGET = '''\
<?xml version="1.0" encoding="UTF-8" standalone="no"?>
<?pde version="3.8"?>
<target name="demo">
  <locations>
    <location path="/opt/eclipse/plugins" type="Directory"/>
  </locations>
</target>
'''

class Repo(object):
    '''A small local Maven repository'''
    def __init__(self, root):
        self.root = str(root)

    def add(self, groupId, artifactId, version, scope='compile', bundle=True, sources=True):
        dir = os.path.join(self.root, *groupId.split('.'))
        dir = os.path.join(dir, artifactId, version)

        manifest = makeManifest(Bundle_SymbolicName='%s.%s' % (groupId, artifactId), Bundle_Version=version) if bundle else None
        jar = makeJar(os.path.join(dir, '%s-%s.jar' % (artifactId, version)), {'A.class': b'x'}, manifest)
        if sources:
            makeJar(os.path.join(dir, '%s-%s-sources.jar' % (artifactId, version)), {'A.java': b'class A {}'})

        return ResolvedArtifact(groupId, artifactId, version, scope=scope, file=jar)

    def dir(self, artifact):
        return os.path.realpath(os.path.dirname(artifact.file))

def setup(tmp_path, **options):
    base = writeFile(tmp_path / 'demo.target', BASE_TARGET)
    options.setdefault('buildDirectory', str(tmp_path / 'target'))
    config = Configuration(baseDefinition=base, **options)
    return config, Repo(tmp_path / 'repo')

def test_addPomDependencies(tmp_path):
    config, repo = setup(tmp_path)
    junit = repo.add('junit', 'junit', '4.11', scope='test')
    hamcrest = repo.add('org.hamcrest', 'hamcrest-core', '1.3', scope='test')
    junitSources = ResolvedArtifact('junit', 'junit', '4.11', classifier='sources', scope='test',
        file=os.path.join(os.path.dirname(junit.file), 'junit-4.11-sources.jar'))

    assert AddPomDependencies(config).run([junit, hamcrest, junitSources])

    output = config.getOutputFile()
    assert os.path.join(str(tmp_path), 'target', 'demo-pde.target') == output

    target = TargetDefinition(output)
    assert ['/opt/eclipse/plugins', repo.dir(junit), repo.dir(hamcrest)] == target.directoryLocations()

    assert os.path.exists(os.path.join(os.path.dirname(junit.file), 'junit-4.11-sources-bundle.jar'))

def test_prepend(tmp_path):
    config, repo = setup(tmp_path, placement='prepend', createSourceBundles=False)
    junit = repo.add('junit', 'junit', '4.11')

    AddPomDependencies(config).run([junit])

    target = TargetDefinition(config.getOutputFile())
    assert [repo.dir(junit), '/opt/eclipse/plugins'] == target.directoryLocations()
    assert not os.path.exists(os.path.join(os.path.dirname(junit.file), 'junit-4.11-sources-bundle.jar'))

def test_excludeP2(tmp_path):
    config, repo = setup(tmp_path)
    p2 = repo.add('p2.eclipse.core', 'org.eclipse.core.runtime', '3.8.0')
    junit = repo.add('junit', 'junit', '4.11')

    AddPomDependencies(config).run([p2, junit])

    target = TargetDefinition(config.getOutputFile())
    assert ['/opt/eclipse/plugins', repo.dir(junit)] == target.directoryLocations()
    assert not os.path.exists(os.path.join(os.path.dirname(p2.file), 'org.eclipse.core.runtime-3.8.0-sources-bundle.jar'))

def test_includeP2(tmp_path):
    config, repo = setup(tmp_path, excludeP2=False)
    p2 = repo.add('p2.eclipse.core', 'org.eclipse.core.runtime', '3.8.0')

    AddPomDependencies(config).run([p2])

    target = TargetDefinition(config.getOutputFile())
    assert ['/opt/eclipse/plugins', repo.dir(p2)] == target.directoryLocations()
    assert os.path.exists(os.path.join(os.path.dirname(p2.file), 'org.eclipse.core.runtime-3.8.0-sources-bundle.jar'))

def test_skippedBundleDoesNotStopRun(tmp_path, caplog):
    config, repo = setup(tmp_path)
    plain = repo.add('commons-io', 'commons-io', '2.4', bundle=False)
    junit = repo.add('junit', 'junit', '4.11')

    with caplog.at_level(logging.WARNING):
        AddPomDependencies(config).run([plain, junit])

    assert 'Manifest is missing for artifact commons-io:commons-io:2.4' in caplog.text
    target = TargetDefinition(config.getOutputFile())
    assert ['/opt/eclipse/plugins', repo.dir(plain), repo.dir(junit)] == target.directoryLocations()

def test_sameOutputTwice(tmp_path):
    config, repo = setup(tmp_path)
    artifacts = [repo.add('junit', 'junit', '4.11'), repo.add('org.hamcrest', 'hamcrest-core', '1.3')]

    AddPomDependencies(config).run(artifacts)
    with open(config.getOutputFile(), 'rb') as fh:
        first = fh.read()

    AddPomDependencies(config).run(artifacts)
    with open(config.getOutputFile(), 'rb') as fh:
        second = fh.read()

    assert first == second

def test_missingBaseDefinition(tmp_path):
    config = Configuration(baseDefinition=str(tmp_path / 'missing.target'), buildDirectory=str(tmp_path / 'target'))

    with pytest.raises(ConfigurationError):
        AddPomDependencies(config).run([])

    assert not os.path.exists(str(tmp_path / 'target'))

def test_baseDefinitionIsDirectory(tmp_path):
    config = Configuration(baseDefinition=str(tmp_path), buildDirectory=str(tmp_path / 'target'))

    with pytest.raises(ConfigurationError):
        AddPomDependencies(config).run([])

def test_missingLocations(tmp_path):
    base = writeFile(tmp_path / 'demo.target', '<target name="demo"/>')
    config = Configuration(baseDefinition=base, buildDirectory=str(tmp_path / 'target'))

    with pytest.raises(MalformedInputError):
        AddPomDependencies(config).run([])

    assert not os.path.exists(config.getOutputFile())

def test_noDependencySource(tmp_path):
    config, repo = setup(tmp_path)

    with pytest.raises(ConfigurationError):
        AddPomDependencies(config).run()

def test_incremental(tmp_path):
    config, repo = setup(tmp_path, incremental=True)
    junit = repo.add('junit', 'junit', '4.11')

    tool = AddPomDependencies(config)
    assert isinstance(tool.buildContext, IncrementalBuildContext)
    assert tool.run([junit])

    # Make sure the output is newer than the base definition
    output = config.getOutputFile()
    mtime = os.path.getmtime(config.baseDefinition)
    os.utime(output, (mtime + 10, mtime + 10))

    assert not tool.run([junit])

    os.utime(config.baseDefinition, (mtime + 20, mtime + 20))
    assert tool.run([junit])

def test_dependencyList(tmp_path):
    config, repo = setup(tmp_path)
    junit = repo.add('junit', 'junit', '4.11', scope='test')
    hamcrest = repo.add('org.hamcrest', 'hamcrest-core', '1.3', scope='test')

    config.dependencies = writeFile(tmp_path / 'deps.txt', '''
The following files have been resolved:
   junit:junit:jar:4.11:test:%s
   org.hamcrest:hamcrest-core:jar:1.3:test
   org.example:missing:jar:1.0:compile
''' % junit.file)
    config.localRepository = repo.root

    AddPomDependencies(config).run()

    target = TargetDefinition(config.getOutputFile())
    assert ['/opt/eclipse/plugins', repo.dir(junit), repo.dir(hamcrest)] == target.directoryLocations()

def test_pom(tmp_path):
    config, repo = setup(tmp_path)
    junit = repo.add('junit', 'junit', '4.11', scope='test')

    config.pom = writeFile(tmp_path / 'pom.xml', '''\
<project xmlns="http://maven.apache.org/POM/4.0.0">
  <modelVersion>4.0.0</modelVersion>
  <groupId>com.example</groupId>
  <artifactId>demo</artifactId>
  <version>1.0</version>
  <dependencies>
    <dependency>
      <groupId>junit</groupId>
      <artifactId>junit</artifactId>
      <version>4.11</version>
      <scope>test</scope>
    </dependency>
  </dependencies>
</project>
''')
    config.localRepository = repo.root

    AddPomDependencies(config).run()

    target = TargetDefinition(config.getOutputFile())
    assert ['/opt/eclipse/plugins', repo.dir(junit)] == target.directoryLocations()

def resetLogging():
    root = logging.getLogger()
    for handler in list(root.handlers):
        handler.close()
    root.handlers = []

def test_main(tmp_path):
    base = writeFile(tmp_path / 'demo.target', BASE_TARGET)
    repo = Repo(tmp_path / 'repo')
    junit = repo.add('junit', 'junit', '4.11')
    deps = writeFile(tmp_path / 'deps.txt', '   junit:junit:jar:4.11:compile:%s\n' % junit.file)
    output = str(tmp_path / 'out' / 'demo.target')

    try:
        main('pde-target', ['-b', base, '-d', deps, '-o', output, '--no-source-bundles'])
    finally:
        resetLogging()

    assert ['/opt/eclipse/plugins', repo.dir(junit)] == TargetDefinition(output).directoryLocations()
    assert os.path.exists(output + '.log')

def test_run_exitCode(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, 'argv', ['pde-target', '-b', str(tmp_path / 'missing.target'),
                                      '--log-file', str(tmp_path / 'pde-target.log')])

    try:
        assert 1 == run()
    finally:
        resetLogging()

def test_run_logFileNotWritable(tmp_path, monkeypatch):
    base = writeFile(tmp_path / 'demo.target', BASE_TARGET)
    blocker = writeFile(tmp_path / 'blocker', 'x')
    monkeypatch.setattr(sys, 'argv', ['pde-target', '-b', base,
                                      '--log-file', os.path.join(blocker, 'logs', 'pde-target.log')])

    try:
        assert 1 == run()
    finally:
        resetLogging()

def test_main_logFileNotWritable(tmp_path):
    base = writeFile(tmp_path / 'demo.target', BASE_TARGET)
    blocker = writeFile(tmp_path / 'blocker', 'x')

    try:
        with pytest.raises(ConfigurationError):
            main('pde-target', ['-b', base, '--log-file', os.path.join(blocker, 'pde-target.log')])
    finally:
        resetLogging()
