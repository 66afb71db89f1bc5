#!/usr/bin/env python
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
"""Launcher for pde-target which works without installing the package

Created on Mar 14, 2013

@author: Aaron Digulla <digulla@hepe.com>
"""
import sys
from pdetarget.tool import run

if __name__ == '__main__':
    sys.exit(run())
